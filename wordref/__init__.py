"""wordref: conjugations, definitions and translations from WordReference in the terminal."""

__version__ = "0.1.0"
