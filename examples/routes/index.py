from sentiero import Response


async def GET(request, env, ctx, params):
    return Response(body=f"{env['greeting']}, World!")
