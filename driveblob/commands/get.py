import sys

from . import StorageCommand, CommandError
from ..exceptions import NotExist, StorageError


class Command(StorageCommand):
    help = "Download a blob"

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument(
            "-o", "--output",
            help="File to write the blob to. Writes to standard output if "
                 "not given",
        )

    def handle(self, args):
        try:
            contents = args.storage.download(args.ref)
        except NotExist:
            raise CommandError("No blob stored as {}".format(args.ref))
        except StorageError as e:
            raise CommandError(str(e))

        if args.output is None:
            sys.stdout.buffer.write(contents)
            sys.stdout.buffer.flush()
        else:
            with open(args.output, "wb") as f:
                f.write(contents)
            self.print("Wrote {} bytes to {}".format(len(contents),
                                                     args.output))
