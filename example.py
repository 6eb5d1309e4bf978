from pathlib import Path

from sentiero import Sentiero, discover


async def lifespan(app: Sentiero):
    print("Starting...")
    yield
    print("Shutting Down...")


app = Sentiero(
    discover(Path(__file__).parent / "examples" / "routes"),
    env={"greeting": "Hello"},
    lifespan=lifespan,
)

if __name__ == "__main__":
    app.serve(port=8080)
