from .common import getColoredLogger

from os.path import join, dirname

VERSION = open(join(dirname(__file__), "version.txt")).read().strip()

__all__ = ["VERSION", "getColoredLogger"]
