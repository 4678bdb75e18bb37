"""
main.py

Runs the solver from a source checkout:

    python main.py -size 5
"""

from wordle_solver.cli import main


if __name__ == "__main__":
    main()
