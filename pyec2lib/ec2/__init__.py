# This file is part of pyec2lib. See LICENSE file for license information.
"""EC2 client wrapper and the objects it returns."""
