"""Status-bar blocks for CPU, memory, load, disk space, backlight, mail, Docker and keyboard layout."""

__version__ = "0.1.0"