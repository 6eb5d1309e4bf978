from sentiero import Response

USERS = {"1": "alice", "2": "bob"}


async def GET(request, env, ctx, params):
    return Response(body=[{"id": key, "name": name} for key, name in USERS.items()])


async def POST(request, env, ctx, params):
    data = request.json()
    return Response(body={"created": data.get("name")}, status_code=201)
