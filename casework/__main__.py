from casework.cmdline import main

main()
