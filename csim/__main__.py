import sys

from csim.cacheMemTrace import main

sys.exit(main())
