# This file makes mapoffset.src a Python package
