from form_records.cli.main import main

main()
