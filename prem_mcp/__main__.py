from prem_mcp.server import main

main()
