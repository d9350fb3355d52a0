from apphub_deploy.cli.app import main

main()
