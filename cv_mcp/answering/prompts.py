"""Prompt and fallback text builders for CV questions."""

# Characters of CV text placed in the system prompt. Long CVs lose their
# tail; this bounds the payload sent to the model.
PROMPT_CHAR_LIMIT = 3_000

# Characters of CV text echoed by the credential-free fallback answer.
PREVIEW_CHAR_LIMIT = 100

NO_ANSWER = "No answer found."


def build_system_prompt(document_text: str, char_limit: int = PROMPT_CHAR_LIMIT) -> str:
    """Instruction restricting the model to the (truncated) CV text."""
    return f"Answer based only on this CV: {document_text[:char_limit]}..."


def build_messages(question: str) -> list[dict[str, str]]:
    """Build the Anthropic messages list: the question is the only user turn."""
    return [{"role": "user", "content": question}]


def build_fallback_answer(
    question: str,
    document_text: str,
    char_limit: int = PREVIEW_CHAR_LIMIT,
) -> str:
    """Deterministic stand-in answer used when no model credential is set."""
    return f'Simulated response for: "{question}". CV text: {document_text[:char_limit]}...'
