# ==========================================
# 1. Configuration Files
# ==========================================
CONFIG_CREDENTIALS_FILE = "config_credentials.json"

# Keys accepted in config_credentials.json
CREDENTIALS_KEYS = {
    "subscription_id": "azure_subscription_id",
    "tenant_id": "azure_tenant_id",
    "client_id": "azure_client_id",
    "client_secret": "azure_client_secret",
    "environment": "azure_environment",
    "location": "azure_region",
}

# ==========================================
# 2. Environment Variables
# ==========================================
ENV_SUBSCRIPTION_ID = "ARM_SUBSCRIPTION_ID"
ENV_TENANT_ID = "ARM_TENANT_ID"
ENV_CLIENT_ID = "ARM_CLIENT_ID"
ENV_CLIENT_SECRET = "ARM_CLIENT_SECRET"
ENV_ENVIRONMENT = "ARM_ENVIRONMENT"
ENV_TEST_LOCATION = "ARM_TEST_LOCATION"
ENV_PROVIDER_STRICT = "ARM_PROVIDER_STRICT"
ENV_SKIP_PROVIDER_REGISTRATION = "ARM_SKIP_PROVIDER_REGISTRATION"
ENV_ACCEPTANCE = "ARM_ACC"
ENV_CONFIG_FILE = "ARM_CONFIG_FILE"

# ==========================================
# 3. Cloud Environments
# ==========================================
DEFAULT_ENVIRONMENT = "public"

ENVIRONMENTS = {
    "public": {
        "resource_manager": "https://management.azure.com/",
        "authority_host": "login.microsoftonline.com",
    },
    "usgovernment": {
        "resource_manager": "https://management.usgovcloudapi.net/",
        "authority_host": "login.microsoftonline.us",
    },
    "china": {
        "resource_manager": "https://management.chinacloudapi.cn/",
        "authority_host": "login.chinacloudapi.cn",
    },
    "german": {
        "resource_manager": "https://management.microsoftazure.de/",
        "authority_host": "login.microsoftonline.de",
    },
}

# ==========================================
# 4. Logging
# ==========================================
LOGGER_NAME = "azurerm"
DEBUG_MODE = "DEBUG"
