from toy_planning.cli.main import main

main()
