from . import directories
from . import configs
from .logutil import Logger, info, process_step, warn, error, success, setting_config, debug
from .config_models import GeoTransformConfig, CornerConfig, read_config_file
