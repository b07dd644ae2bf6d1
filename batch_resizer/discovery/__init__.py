from .finder import DEFAULT_EXTENSIONS, find_images
