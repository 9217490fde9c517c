from icon_resizer import api
from fastapi.routing import APIRoute

for r in api.app.routes:
    if isinstance(r, APIRoute):
        print('Path:', r.path)
        print('Name:', r.name)
        print('Methods:', r.methods)
        print('Form/body params:', [p.name for p in r.dependant.body_params])
        print('Query params:', [p.name for p in r.dependant.query_params])
        print('---')
