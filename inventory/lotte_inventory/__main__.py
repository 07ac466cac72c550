from lotte_inventory.main import main

main()
