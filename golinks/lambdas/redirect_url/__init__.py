from golinks.utils import initialize_logging


initialize_logging()
