from showtime.cli.main import main

main()
