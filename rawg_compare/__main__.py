"""Allow running the client with ``python -m rawg_compare``."""

from rawg_compare.main import main

if __name__ == "__main__":
    main()
