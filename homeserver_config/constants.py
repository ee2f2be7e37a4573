# URI schemes accepted for the home server
SUPPORTED_SCHEMES = ("http", "https")

# ConnectionConfig wire keys
HOME_SERVER_URL_JSON_KEY = "home_server_url"
IDENTITY_SERVER_URL_JSON_KEY = "identity_server_url"
CREDENTIALS_JSON_KEY = "credentials"
CERTIFICATE_PINS_JSON_KEY = "certificate_pins"

# CertificatePin wire keys
HOSTNAME_JSON_KEY = "hostname"
PUBLIC_HASH_KEY_JSON_KEY = "publicHashKey"

# Credentials wire keys
USER_ID_JSON_KEY = "user_id"
HOME_SERVER_JSON_KEY = "home_server"
ACCESS_TOKEN_JSON_KEY = "access_token"
REFRESH_TOKEN_JSON_KEY = "refresh_token"
DEVICE_ID_JSON_KEY = "device_id"

# Environment variable read by the command line entrypoint
ACCESS_TOKEN_ENV_VAR = "HOMESERVER_ACCESS_TOKEN"
