import sys

from twofa.otp_cli import main

sys.exit(main())
