"""SQL generation through OpenRouter, Ollama and the claude command-line tool."""