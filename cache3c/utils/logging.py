import logging


def get_logger(name: str = "cache3c"):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    return logging.getLogger(name)


def set_verbose(verbose: bool):
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)
