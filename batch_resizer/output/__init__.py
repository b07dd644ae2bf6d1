from .destination import OUTPUT_SUFFIX, PART_SUFFIX, DestinationManager
