from api import create_app
from config import AppConfig
from logging_setup import setup_logging

config = AppConfig.from_env()
setup_logging(config.log_level, config.log_dir)

app = create_app(config)
