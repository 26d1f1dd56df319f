from resampled.images import Folder, SourceImage

from .utils import create_source, get_html_attrs, render_tag


def test_img_tag():
    attrs = get_html_attrs("{% resampled img 'SetWidth' 100 %}",
                           img=create_source())
    assert attrs == {
        'src': '/media/assets/_resampled/SetWidth100-photo.jpg',
        'alt': 'assets/_resampled/SetWidth100-photo.jpg',
    }


def test_assignment():
    ttag = "{% resampled img 'CroppedImage' 30 20 as thumb %}{{ thumb.width }}x{{ thumb.height }}"
    assert render_tag(ttag, img=create_source()) == '30x20'


def test_unknown_format_renders_nothing():
    assert render_tag("{% resampled img 'Sepia' %}", img=create_source()) == ''


def test_missing_image_renders_nothing():
    assert render_tag("{% resampled img 'SetWidth' 100 %}", img=None) == ''
    assert render_tag("{% resampled img 'SetWidth' 100 %}",
                      img=SourceImage('assets/missing.jpg', id=1)) == ''


def test_nested_derivatives():
    ttag = ("{% resampled img 'SetWidth' 100 as thumb %}"
            "{% resampled thumb 'SetHeight' 20 %}")
    attrs = get_html_attrs(ttag, img=create_source())
    assert attrs['src'] == '/media/assets/_resampled/SetHeight20-SetWidth100-photo.jpg'


def test_nested_derivatives_in_a_folder():
    ttag = ("{% resampled img 'SetWidth' 100 as thumb %}"
            "{% resampled thumb 'SetHeight' 20 %}")
    img = create_source('assets/photos/photo.jpg',
                        parent=Folder('assets/photos/'))
    attrs = get_html_attrs(ttag, img=img)
    assert (attrs['src']
            == '/media/assets/photos/_resampled/SetHeight20-SetWidth100-photo.jpg')
