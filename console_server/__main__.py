from console_server.main import main

main()
