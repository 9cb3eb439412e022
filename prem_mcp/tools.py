# prem_mcp/tools.py
from prem_mcp.schemas import ChatArgs, TemplateChatArgs, UploadArgs

TOOLS = {
    "chat": {
        "name": "chat",
        "description": "Chat with Prem AI - supports chat completions with optional RAG capabilities.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "The chat message to send"},
                "system_prompt": {
                    "type": "string",
                    "description": "Optional system prompt to guide the model's behavior",
                },
                "model": {"type": "string", "description": "Optional model to use for completion"},
                "temperature": {
                    "type": "number",
                    "description": "Optional temperature for response generation",
                },
                "max_tokens": {"type": "integer", "description": "Optional maximum tokens to generate"},
                "repository_ids": {
                    "type": "array",
                    "items": {"type": "integer"},
                    "description": "Optional array of repository IDs for RAG",
                },
                "similarity_threshold": {
                    "type": "number",
                    "description": "Optional similarity threshold for RAG",
                },
                "limit": {"type": "integer", "description": "Optional limit of context chunks for RAG"},
            },
            "required": ["query"],
        },
    },
    "prem_upload_document": {
        "name": "prem_upload_document",
        "description": "Upload a document to a Prem AI repository",
        "inputSchema": {
            "type": "object",
            "properties": {
                "repository_id": {"type": "string", "description": "ID of the repository to upload to"},
                "file_path": {"type": "string", "description": "Path to the file to upload"},
            },
            "required": ["repository_id", "file_path"],
        },
    },
    "prem_chat_with_template": {
        "name": "prem_chat_with_template",
        "description": "Chat using a predefined Prem AI prompt template",
        "inputSchema": {
            "type": "object",
            "properties": {
                "template_id": {"type": "string", "description": "ID of the prompt template to use"},
                "params": {
                    "type": "object",
                    "additionalProperties": {"type": "string"},
                    "description": "Parameters to fill in the template",
                },
                "model": {"type": "string", "description": "Optional model to use"},
                "temperature": {"type": "number", "description": "Optional temperature parameter"},
                "max_tokens": {"type": "integer", "description": "Optional maximum tokens to generate"},
            },
            "required": ["template_id", "params"],
        },
    },
}

# 인자 검증용 모델
TOOL_ARGS = {
    "chat": ChatArgs,
    "prem_upload_document": UploadArgs,
    "prem_chat_with_template": TemplateChatArgs,
}
