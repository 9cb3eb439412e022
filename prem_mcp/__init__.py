SERVER_NAME = "prem-ai-server"
SERVER_VERSION = "0.1.0"
