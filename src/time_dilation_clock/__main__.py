from time_dilation_clock.main import main

main()
