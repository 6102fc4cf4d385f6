from pv.main import main

main()
