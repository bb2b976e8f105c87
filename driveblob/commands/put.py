import sys

from . import StorageCommand, CommandError
from ..exceptions import StorageError


class Command(StorageCommand):
    help = "Upload a blob, replacing any blob already stored under the ref"

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument(
            "file", nargs="?", default="-",
            help="File to upload. Reads standard input if omitted or -",
        )

    def handle(self, args):
        if args.file == "-":
            contents = sys.stdin.buffer.read()
        else:
            try:
                with open(args.file, "rb") as f:
                    contents = f.read()
            except OSError as e:
                raise CommandError("Could not read {}: {}".format(args.file, e))

        try:
            args.storage.put(args.ref, contents)
        except StorageError as e:
            raise CommandError(str(e))
        self.print("Stored {} bytes as {}".format(len(contents), args.ref))
