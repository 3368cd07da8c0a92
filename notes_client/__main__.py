from notes_client.main import main

main()
