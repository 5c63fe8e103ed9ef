"""Minimal demonstration of the Mixgarden client.

Requires MIXGARDEN_API_KEY in the environment (or a .env / mixgarden.yaml file).
"""

import asyncio

from mixgarden import MixgardenClient


async def main() -> None:
    client = MixgardenClient()

    models = await client.get_models()
    print("Models:", [m.id for m in models])

    response = await client.chat(
        "hello mixgarden!",
        models[0].id if models else "mistral-small",
        plugin_id="tone-pro",
        plugin_settings={
            "emotion-type": "neutral",
            "emotion-intensity": 6,
            "personality-type": "friendly",
        },
    )
    print("Chat response:", response.to_dict())

    plugins = await client.get_plugins()
    print("Plugins:", [p.id for p in plugins])

    conversations = await client.get_conversations()
    print("Conversations:", [c.id for c in conversations])
    if conversations:
        print("First conversation:", (await client.get_conversation(conversations[0].id)).raw)


if __name__ == "__main__":
    asyncio.run(main())
