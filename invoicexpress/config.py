# invoicexpress/config.py

# --- FORMATOS DE FECHA ---
# Formatos fijos para todo el proceso, independientes del locale
DATE_FORMAT = '%d/%m/%Y'
DATE_TIME_FORMAT = '%d/%m/%Y %H:%M:%S'

# --- CONFIGURACIÓN DE LA API DE INVOICEXPRESS ---
# Cada cuenta tiene su propio subdominio
BASE_URL_TEMPLATE = 'https://{account_name}.app.invoicexpress.com/'

# Nombres de las variables de entorno (.env) con las credenciales
ACCOUNT_NAME_ENV = 'INVOICEXPRESS_ACCOUNT_NAME'
API_KEY_ENV = 'INVOICEXPRESS_API_KEY'
TIMEOUT_ENV = 'INVOICEXPRESS_TIMEOUT'

DEFAULT_TIMEOUT = 30
USER_AGENT = 'invoicexpress-python/1.0.0'

XML_CONTENT_TYPE = 'application/xml; charset=utf-8'
XML_ENCODING = 'UTF-8'
