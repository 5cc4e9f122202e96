from cv_mcp.server import main

main()
