from nimbus.app import main

main()
