from lumen_shift import main

main()
