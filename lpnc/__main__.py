from lpnc.main import main
import sys

sys.exit(main())
