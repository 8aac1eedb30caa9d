#!/usr/bin/env python3
"""TamoStudy — entry point.

Run with:
    python main.py
    python -m tamostudy
"""

from tamostudy.__main__ import main


if __name__ == "__main__":
    main()
