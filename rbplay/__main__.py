"""``python -m rbplay`` opens the interactive viewer."""

from .log import setup_logging
from .viewer import main

if __name__ == "__main__":
    setup_logging()
    main()
