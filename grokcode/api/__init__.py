"""Chat-completion data models and async clients for xAI, OpenAI and Anthropic."""