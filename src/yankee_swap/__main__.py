"""``python -m yankee_swap`` runs the ``yankee-swap`` command."""

from yankee_swap.cli.main import main

if __name__ == "__main__":
    main()
