from vibe_todo.cli.main import main

main()
