# ============================================================================
# File:       tabquery/handlers/log_handler.py
# Purpose:    Pisanje logova na osnovu nivoa (DEBUG, INFO, ...) uz LOG_LEVEL prag
# Author:     Aleksandar Popovic
# Created:    2025-08-18
# Updated:    2025-08-27
# ============================================================================

import os
from datetime import datetime
from tabquery.config.env import EnvLoader

LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "SUCCESS": 25,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


class LogHandler:
    default_log_file_path = "data/logs/tabquery.log"

    @staticmethod
    def log_file_path() -> str:
        # čita se pri svakom upisu da bi override iz okruženja (testovi) odmah važio
        return EnvLoader.get("LOG_FILE_PATH", LogHandler.default_log_file_path)

    @staticmethod
    def threshold() -> int:
        level = (EnvLoader.get("LOG_LEVEL", "info") or "info").strip().upper()
        return LEVELS.get(level, LEVELS["INFO"])

    @staticmethod
    def _ensure_log_dir(path: str):
        try:
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        except Exception as e:
            print(f"❌ Ne mogu kreirati log direktorijum: {e}")

    @staticmethod
    def _write(level, message):
        level = level.upper()
        if LEVELS.get(level, LEVELS["INFO"]) < LogHandler.threshold():
            return
        try:
            path = LogHandler.log_file_path()
            LogHandler._ensure_log_dir(path)
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            log_entry = f"[{level}] {timestamp} - {message}\n"
            with open(path, "a", encoding="utf-8") as f:
                f.write(log_entry)
        except Exception as e:
            print(f"❌ Neuspelo logovanje: {e}")

    @staticmethod
    def debug(message):
        LogHandler._write("DEBUG", message)

    @staticmethod
    def info(message):
        LogHandler._write("INFO", message)

    @staticmethod
    def warning(message):
        LogHandler._write("WARNING", message)

    @staticmethod
    def success(message):
        LogHandler._write("SUCCESS", message)

    @staticmethod
    def error(message):
        LogHandler._write("ERROR", message)

    @staticmethod
    def critical(message):
        LogHandler._write("CRITICAL", message)
