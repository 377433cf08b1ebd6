from pki.ca.errors import PersistenceError
from pki.ca.root_ca import RootCAIssuer
from shared.config import Settings

# Pydantic Settings
Settings.model_config
Settings.APP_ENV

# Public API used by downstream issuers and tests
RootCAIssuer.config
PersistenceError.path
