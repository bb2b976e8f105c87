import abc
import json
from argparse import ArgumentTypeError
import os.path
import logging


class CommandError(Exception):
    pass


class CommandBase(metaclass=abc.ABCMeta):

    help = ""
    logger = logging.getLogger("driveblob.cmd")

    def __init__(self):
        pass

    def add_arguments(self, parser):
        pass

    @abc.abstractmethod
    def handle(self, args):
        pass

    def print(self, s):
        self.logger.info(s)

def _storage_type(config_path):
    """Loads a JSON file of storage options and opens a Drive storage"""
    if not os.path.exists(config_path):
        raise ArgumentTypeError("Config file {} does not exist".format(
            config_path))
    try:
        with open(config_path, encoding="utf-8") as f:
            opts = json.load(f)
    except ValueError as e:
        raise ArgumentTypeError("Config file {} is not valid JSON: {}".format(
            config_path, e))
    if not isinstance(opts, dict):
        raise ArgumentTypeError("Config file {} must hold a JSON object".format(
            config_path))

    from driveblob.exceptions import ConfigurationError
    from driveblob.storage import open_storage
    try:
        return open_storage("drive", opts)
    except ConfigurationError as e:
        raise ArgumentTypeError(str(e))


class StorageCommand(CommandBase):

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("storage", type=_storage_type, metavar="config",
                            help="JSON file holding the Drive token options")
        parser.add_argument("ref", help="Name of the stored blob")
