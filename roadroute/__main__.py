from roadroute.cli import main

main()
