"""
The formats every registry starts out with. Each one receives the opened
image (a :class:`resampled.processors.ProcessedImage`) followed by its
arguments, and returns the processed image or ``None``.

"""


def set_width(image, width):
    return image.resize_by_width(width)


def set_height(image, height):
    return image.resize_by_height(height)


def padded_image(image, width, height):
    return image.padded_resize(width, height)


def resized_image(image, width, height):
    return image.resize(width, height)


def cropped_image(image, width, height):
    return image.cropped_resize(width, height)


def padded_preset(size):
    width, height = size

    def generate(image):
        return image.padded_resize(width, height)
    return generate


def cropped_preset(size):
    width, height = size

    def generate(image):
        return image.cropped_resize(width, height)
    return generate


def register_default_formats(registry):
    config = registry.config

    registry.register('SetWidth', 1, set_width)
    registry.register('SetHeight', 1, set_height)
    registry.register('SetSize', 2, padded_image)
    registry.register('PaddedImage', 2, padded_image)
    registry.register('ResizedImage', 2, resized_image)
    registry.register('CroppedImage', 2, cropped_image)

    registry.register('CMSThumbnail', 0, padded_preset(config.cms_thumbnail))
    registry.register('AssetLibraryPreview', 0,
                      padded_preset(config.asset_preview))
    registry.register('AssetLibraryThumbnail', 0,
                      padded_preset(config.asset_thumbnail))
    registry.register('StripThumbnail', 0,
                      cropped_preset(config.strip_thumbnail))
