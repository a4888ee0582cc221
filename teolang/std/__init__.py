# Standard library for Teo programs.
