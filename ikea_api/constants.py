# Path: ikea_api/constants.py
"""
IKEA API Module Constants

Module-wide constants for catalog search, metadata, thumbnail and model
operations. The remote endpoints are an external contract: templates,
header names and field names below mirror what the catalog service expects.

No hardcoded paths - cache and log locations come from .env via config_loader.
"""

# ============================================================================
# HTTP STATUS CODES
# ============================================================================
HTTP_OK: int = 200
HTTP_MULTIPLE_CHOICES: int = 300

# ============================================================================
# DEFAULT CONFIGURATION VALUES
# ============================================================================
DEFAULT_REGION: str = 'ie'
DEFAULT_LOCALE: str = 'en'
DEFAULT_CACHE_DIRNAME: str = 'ikea_cache'
DEFAULT_POOL_SIZE: int = 4
DEFAULT_REQUEST_TIMEOUT: float = 30.0  # seconds, whole request
DEFAULT_CONNECT_TIMEOUT: float = 10.0
DEFAULT_SEARCH_PAGE_SIZE: int = 24
IDENTIFIER_SEARCH_PAGE_SIZE: int = 1

# ============================================================================
# REMOTE CATALOG CONTRACT
# ============================================================================
DEFAULT_SEARCH_BASE_URL: str = 'https://sik.search.blue.cdtapps.com'
DEFAULT_CATALOG_BASE_URL: str = 'https://www.ikea.com'
DEFAULT_API_BASE_URL: str = 'https://web-api.ikea.com'

ENDPOINT_SEARCH: str = '/{region}/{locale}/search-result-page'
ENDPOINT_METADATA: str = '/{region}/{locale}/products/{partition}/{item_no}.json'
ENDPOINT_EXISTS: str = '/{region}/{locale}/rotera/data/exists/{item_no}/'
ENDPOINT_MODEL: str = '/{region}/{locale}/rotera/data/model/{item_no}/'

# Fixed search parameters sent alongside q/types/size
SEARCH_TYPES: str = 'PRODUCT'
SEARCH_EXTRA_PARAMS: dict = {
    'c': 'sr',
    'v': '20210322',
    'autocorrect': 'true',
    'subcategories-style': 'tree-navigation',
}

# Metadata URLs partition by the last three digits of the compact number
METADATA_PARTITION_SLICE: slice = slice(5, 8)

HEADER_USER_AGENT: str = 'User-Agent'
HEADER_ACCEPT: str = 'Accept'
HEADER_CLIENT_ID: str = 'X-Client-Id'

DEFAULT_USER_AGENT: str = 'ikea-api-client/1.0 (+catalog cache)'
DEFAULT_ACCEPT_HEADER: str = '*/*'
DEFAULT_CLIENT_ID: str = '4863e7d2-1428-4324-890b-ae5dede24fc6'

# ============================================================================
# RESPONSE FIELD NAMES
# ============================================================================
SEARCH_RESULT_PATH: tuple = ('searchResultPage', 'products', 'main', 'items')
SEARCH_ITEM_WRAPPER: str = 'product'

FIELD_ITEM_NO: str = 'itemNo'
FIELD_NAME: str = 'name'
FIELD_IMAGE_URL: str = 'mainImageUrl'
FIELD_IMAGE_ALT: str = 'mainImageAlt'
FIELD_DETAIL_URL: str = 'pipUrl'

FIELD_EXISTS: str = 'exists'
FIELD_MODEL_URL: str = 'modelUrl'

# ============================================================================
# CACHE LAYOUT
# ============================================================================
ARTIFACT_METADATA: str = 'metadata.json'
ARTIFACT_THUMBNAIL: str = 'thumbnail.jpg'
ARTIFACT_MODEL: str = 'model.glb'
ARTIFACT_EXISTS: str = 'exists.json'
TEMP_SUFFIX: str = '.part'

# ============================================================================
# INTEGRITY RULES
# ============================================================================
MIN_THUMBNAIL_SIZE: int = 100
MIN_MODEL_SIZE: int = 1024
GLB_MAGIC: bytes = b'glTF'
VALID_URL_SCHEMES: tuple = ('http', 'https')

# Compressed (Draco) model paths and their uncompressed counterparts
MODEL_URL_REWRITE_RULES: tuple = (
    ('/glb_draco/', '/glb/'),
    ('_draco.glb', '.glb'),
)

# ============================================================================
# IPO LOGGING PREFIXES
# ============================================================================
LOG_INPUT: str = '[INPUT]'
LOG_PROCESS: str = '[PROCESS]'
LOG_OUTPUT: str = '[OUTPUT]'

# ============================================================================
# LOGGING COMPONENTS
# ============================================================================
LOGGER_ROOT: str = 'ikea_api'
LOGGER_CORE: str = 'ikea_api.core'
LOGGER_ENGINE: str = 'ikea_api.engine'
LOGGER_CLI: str = 'ikea_api.cli'
LOGGER_TOOLS: str = 'ikea_api.tools'

LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

ACTIVITY_LOG_FILE: str = 'ikea_api_activity.log'
HTTP_LOG_FILE: str = 'http_calls.log'
ERROR_LOG_FILE: str = 'errors.log'

# ============================================================================
# ENVIRONMENT VARIABLE KEYS
# ============================================================================
ENV_REGION: str = 'IKEA_API_REGION'
ENV_LOCALE: str = 'IKEA_API_LOCALE'
ENV_CACHE_DIR: str = 'IKEA_API_CACHE_DIR'
ENV_LOG_DIR: str = 'IKEA_API_LOG_DIR'
ENV_LOG_LEVEL: str = 'IKEA_API_LOG_LEVEL'
ENV_LOG_CONSOLE: str = 'IKEA_API_LOG_CONSOLE'
ENV_POOL_SIZE: str = 'IKEA_API_POOL_SIZE'
ENV_REQUEST_TIMEOUT: str = 'IKEA_API_REQUEST_TIMEOUT'
ENV_CONNECT_TIMEOUT: str = 'IKEA_API_CONNECT_TIMEOUT'
ENV_SEARCH_PAGE_SIZE: str = 'IKEA_API_SEARCH_PAGE_SIZE'
ENV_USER_AGENT: str = 'IKEA_API_USER_AGENT'
ENV_CLIENT_ID: str = 'IKEA_API_CLIENT_ID'
ENV_SEARCH_BASE_URL: str = 'IKEA_API_SEARCH_BASE_URL'
ENV_CATALOG_BASE_URL: str = 'IKEA_API_CATALOG_BASE_URL'
ENV_API_BASE_URL: str = 'IKEA_API_API_BASE_URL'
ENV_MIN_THUMBNAIL_SIZE: str = 'IKEA_API_MIN_THUMBNAIL_SIZE'
ENV_MIN_MODEL_SIZE: str = 'IKEA_API_MIN_MODEL_SIZE'

# ============================================================================
# DRACO TOOLING
# ============================================================================
DRACO_TOOL: str = 'gltf-transform'
DRACO_OUTPUT_SUFFIX: str = '_uncompressed'


__all__ = [
    'HTTP_OK',
    'HTTP_MULTIPLE_CHOICES',
    'DEFAULT_REGION',
    'DEFAULT_LOCALE',
    'DEFAULT_CACHE_DIRNAME',
    'DEFAULT_POOL_SIZE',
    'DEFAULT_REQUEST_TIMEOUT',
    'DEFAULT_CONNECT_TIMEOUT',
    'DEFAULT_SEARCH_PAGE_SIZE',
    'IDENTIFIER_SEARCH_PAGE_SIZE',
    'DEFAULT_SEARCH_BASE_URL',
    'DEFAULT_CATALOG_BASE_URL',
    'DEFAULT_API_BASE_URL',
    'ENDPOINT_SEARCH',
    'ENDPOINT_METADATA',
    'ENDPOINT_EXISTS',
    'ENDPOINT_MODEL',
    'SEARCH_TYPES',
    'SEARCH_EXTRA_PARAMS',
    'METADATA_PARTITION_SLICE',
    'HEADER_USER_AGENT',
    'HEADER_ACCEPT',
    'HEADER_CLIENT_ID',
    'DEFAULT_USER_AGENT',
    'DEFAULT_ACCEPT_HEADER',
    'DEFAULT_CLIENT_ID',
    'SEARCH_RESULT_PATH',
    'SEARCH_ITEM_WRAPPER',
    'FIELD_ITEM_NO',
    'FIELD_NAME',
    'FIELD_IMAGE_URL',
    'FIELD_IMAGE_ALT',
    'FIELD_DETAIL_URL',
    'FIELD_EXISTS',
    'FIELD_MODEL_URL',
    'ARTIFACT_METADATA',
    'ARTIFACT_THUMBNAIL',
    'ARTIFACT_MODEL',
    'ARTIFACT_EXISTS',
    'TEMP_SUFFIX',
    'MIN_THUMBNAIL_SIZE',
    'MIN_MODEL_SIZE',
    'GLB_MAGIC',
    'VALID_URL_SCHEMES',
    'MODEL_URL_REWRITE_RULES',
    'LOG_INPUT',
    'LOG_PROCESS',
    'LOG_OUTPUT',
    'LOGGER_ROOT',
    'LOGGER_CORE',
    'LOGGER_ENGINE',
    'LOGGER_CLI',
    'LOGGER_TOOLS',
    'LOG_FORMAT',
    'LOG_DATE_FORMAT',
    'ACTIVITY_LOG_FILE',
    'HTTP_LOG_FILE',
    'ERROR_LOG_FILE',
    'ENV_REGION',
    'ENV_LOCALE',
    'ENV_CACHE_DIR',
    'ENV_LOG_DIR',
    'ENV_LOG_LEVEL',
    'ENV_LOG_CONSOLE',
    'ENV_POOL_SIZE',
    'ENV_REQUEST_TIMEOUT',
    'ENV_CONNECT_TIMEOUT',
    'ENV_SEARCH_PAGE_SIZE',
    'ENV_USER_AGENT',
    'ENV_CLIENT_ID',
    'ENV_SEARCH_BASE_URL',
    'ENV_CATALOG_BASE_URL',
    'ENV_API_BASE_URL',
    'ENV_MIN_THUMBNAIL_SIZE',
    'ENV_MIN_MODEL_SIZE',
    'DRACO_TOOL',
    'DRACO_OUTPUT_SUFFIX',
]
