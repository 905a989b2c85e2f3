from ci_id._cli import main

main()
