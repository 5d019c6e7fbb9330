from ddns_adjuster.cli import main

raise SystemExit(main())
