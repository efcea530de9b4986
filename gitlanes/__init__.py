APP_VERSION = "0.1"
