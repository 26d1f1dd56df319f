from django.core.management.base import BaseCommand

from ...invalidation import flush
from ...registry import source_registry


class Command(BaseCommand):
    help = ('Deletes the derivatives of every source image provided by the'
            ' registered source providers.')

    def handle(self, *args, **options):
        num_files, num_sources = flush(source_registry.get())
        self.stdout.write('%s formatted images from %s items flushed\n'
                          % (num_files, num_sources))
