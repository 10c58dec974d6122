from wordref.main import main

main()
