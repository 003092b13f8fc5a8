"""NiceGUI web menu."""
