# Models package
# Configuration and tool definition models
