from .version import __version__ as __version__

__title__ = "cryptpipe"
__description__ = "Stream bytes through AES in ECB, CBC, CFB, OFB or CTR mode."
__license__ = "Apache-2.0"
