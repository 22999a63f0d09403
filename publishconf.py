import os, sys
sys.path.insert(0, os.path.dirname(__file__))
from pelicanconf import *  # noqa

SITEURL = 'https://example.org'
RELATIVE_URLS = False

FEED_ALL_ATOM = 'feeds/all.atom.xml'
DELETE_OUTPUT_DIRECTORY = True

# Production settings overrides
INLINE_SVG_OPTIMIZER = {
    'digits': 3,
    'remove_descriptive_elements': False,
    'strip_xml_space_attribute': True,
}
