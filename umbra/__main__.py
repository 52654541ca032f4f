"""
Lets you say `py -m umbra shader.umb` without installing the console script.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from umbra.cmdline import main

main()
