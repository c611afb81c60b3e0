"""
Models - discriminators and WiSARD classifiers.
"""

from .discriminator import Discriminator
from .wisard import WisardBase, BinaryWisard, ordered_labels

__all__ = [
    'Discriminator',
    'WisardBase',
    'BinaryWisard',
    'ordered_labels',
]
