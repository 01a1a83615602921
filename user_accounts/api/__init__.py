"""HTTP interface (FastAPI): app, routers, schemas and error mapping."""
