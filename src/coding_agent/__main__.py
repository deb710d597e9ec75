from coding_agent.app import main

main()
