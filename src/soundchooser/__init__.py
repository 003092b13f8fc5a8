"""soundchooser - list audio output sinks and switch the default one."""

__version__ = "0.1.0"
