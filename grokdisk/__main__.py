from grokdisk.main import main

raise SystemExit(main())
