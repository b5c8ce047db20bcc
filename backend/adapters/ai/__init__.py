# AI Adapters
# Anthropic text generation
