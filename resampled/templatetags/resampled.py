from django import template

register = template.Library()


@register.simple_tag
def resampled(image, format, arg1=None, arg2=None, force=False):
    """
    Renders the derivative of ``image`` in ``format`` as an ``<img>`` tag, or
    nothing when there is no derivative to show. With ``as``, the derivative
    itself (or an empty string) is stored in the context instead::

        {% resampled photo 'SetWidth' 100 %}
        {% resampled photo 'CroppedImage' 50 50 as thumb %}

    """
    if image is None:
        return ''
    derivative = image.get_formatted(format, arg1, arg2, force=force)
    return derivative if derivative is not None else ''
