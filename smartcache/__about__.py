__app_name__ = "smart-cache"
__version__ = "0.1.0"
