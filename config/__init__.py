from .config_loader import ConfigLoader

# NOTE: Loading config at import time keeps ``CONFIG`` populated for modules
# that read it without calling the loader themselves.
CONFIG = ConfigLoader.load_config()
