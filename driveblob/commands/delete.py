from . import StorageCommand, CommandError
from ..exceptions import StorageError


class Command(StorageCommand):
    help = "Delete a blob. Deleting a ref that doesn't exist is not an error"

    def handle(self, args):
        try:
            args.storage.delete(args.ref)
        except StorageError as e:
            raise CommandError(str(e))
        self.print("Deleted {}".format(args.ref))
