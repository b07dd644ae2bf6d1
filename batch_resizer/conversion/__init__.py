from .task import ConversionTask, ImageFile, target_size, validate_scale
from .unit import ConversionUnit
