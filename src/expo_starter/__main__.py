from expo_starter.cli import main

main()
