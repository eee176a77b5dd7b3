import os


os.environ.setdefault("FLASK_ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "INFO")
