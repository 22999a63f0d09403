# --- Site Information ---
SITENAME = 'inline-svg demo'
SITEURL = ''

# --- Paths ---
PATH = 'content'
ARTICLE_PATHS = ['articles']
PAGE_PATHS = ['pages']
STATIC_PATHS = ['icons']

# --- Content Settings ---
TIMEZONE = 'UTC'
DEFAULT_LANG = 'en'
DELETE_OUTPUT_DIRECTORY = True

# --- Feed Settings (disabled for development) ---
FEED_ALL_ATOM = None
CATEGORY_FEED_ATOM = None
TRANSLATION_FEED_ATOM = None
AUTHOR_FEED_ATOM = None
AUTHOR_FEED_RSS = None

# --- Plugins ---
PLUGIN_PATHS = ['pelican-plugins']
PLUGINS = ['inline_svg']
# Optional plugin settings: scour options merged over the plugin defaults.
# <image inline src="..."> paths resolve from the directory pelican runs in.
INLINE_SVG_OPTIMIZER = {
    'digits': 3,
    'remove_descriptive_elements': False,
}

# --- URL Settings ---
RELATIVE_URLS = True
