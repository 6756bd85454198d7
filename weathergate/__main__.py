from weathergate.app import main

main()
