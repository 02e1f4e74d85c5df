# Model imports - organized by domain
from .component_models import *
from .import_models import *
