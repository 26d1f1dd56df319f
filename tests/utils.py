import os
import shutil
from contextlib import contextmanager
from io import BytesIO

from bs4 import BeautifulSoup
from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import FileSystemStorage
from django.template import Context, Template
from PIL import Image

from resampled.cache import DerivativeCache
from resampled.images import SourceImage
from resampled.utils import get_cache, get_storage


def get_image_content(size=(200, 100), color='red', format='JPEG'):
    content = BytesIO()
    Image.new('RGB', size, color).save(content, format)
    return content.getvalue()


def store(filename, content):
    storage = get_storage()
    if storage.exists(filename):
        storage.delete(filename)
    storage.save(filename, ContentFile(content))
    return filename


def create_source(filename='assets/photo.jpg', size=(200, 100), id=1,
                  **kwargs):
    store(filename, get_image_content(size))
    return SourceImage(filename, id=id, **kwargs)


def replace_source_bytes(source, size):
    store(source.filename, get_image_content(size, color='blue'))


def get_stored_size(name):
    with get_storage().open(name, 'rb') as file:
        return Image.open(file).size


def create_cache(**kwargs):
    kwargs.setdefault('timeout', None)
    return DerivativeCache(**kwargs)


@contextmanager
def counting_receiver(signal):
    def receiver(sender, *args, **kwargs):
        receiver.count += 1
    receiver.count = 0
    signal.connect(receiver)
    try:
        yield receiver
    finally:
        signal.disconnect(receiver)


def render_tag(ttag, **context):
    template = Template('{%% load resampled %%}%s' % ttag)
    return template.render(Context(context))


def get_html_attrs(ttag, **context):
    return BeautifulSoup(render_tag(ttag, **context),
                         features="html.parser").img.attrs


class CustomStorage(FileSystemStorage):
    pass


def clear_resampled_test_files():
    get_cache().clear()
    if os.path.exists(settings.MEDIA_ROOT):
        shutil.rmtree(settings.MEDIA_ROOT)
