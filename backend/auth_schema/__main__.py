from auth_schema.main import run

run()
