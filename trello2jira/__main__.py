from trello2jira.cli import main

main()
