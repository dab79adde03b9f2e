from cloudstack_mcp.main import main

main()
