from dao_deploy.cli import main

raise SystemExit(main())
