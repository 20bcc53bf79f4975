import os
import pathlib as pl

# GEOMATRIX_HOME overrides the default per-user base directory
BASE_DIR = pl.Path(os.environ.get("GEOMATRIX_HOME", pl.Path.home() / ".geomatrix"))

LOGS_DIR = BASE_DIR / "logs"

# CONFIGURATION DIRECTORIES -----------
CONFIG_DIR = BASE_DIR / "config"

# QML DIRECTORIES ----------------------
QML_DIR = pl.Path(__file__).resolve().parent.parent / "qml"

if __name__ == '__main__':
    print(f"{BASE_DIR=}")
    print(f"{CONFIG_DIR=}")
    print(f"{LOGS_DIR=}")
