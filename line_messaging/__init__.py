from .config import LineConfig
from .client import LineClient
