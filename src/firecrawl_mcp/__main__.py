from firecrawl_mcp.cli import app

app()
