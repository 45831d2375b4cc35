from copilot_templates.cli import main

main()
