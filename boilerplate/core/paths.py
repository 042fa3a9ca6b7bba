from pathlib import Path

PACKAGE_PATH: Path = (Path(__file__).resolve().parent / '..').resolve()
ROOT_PATH: Path = PACKAGE_PATH.parent
ENV_FILE_PATH: Path = ROOT_PATH / '.env'
