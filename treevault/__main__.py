from treevault.main import main

raise SystemExit(main())
