#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
from typing import Optional

from pydantic import BaseModel

from apiclient.jsonapi import JsonApiClient


class Post(BaseModel):
    id: Optional[int] = None
    user_id: int
    title: str
    body: str


class PostsClient(JsonApiClient):
    async def get_post(self, post_id: int) -> Post:
        return await self.get(f"/posts/{post_id}", Post)

    async def create_post(self, post: Post) -> tuple[int, Post]:
        return await self.post("/posts", post, Post, lambda response, created: (response.status, created))


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch and create posts on JSONPlaceholder")
    p.add_argument("post_id", nargs="?", type=int, default=1)
    p.add_argument("--base-url", default="https://jsonplaceholder.typicode.com")
    return p.parse_args()


async def main() -> None:
    args = parse_args()

    async with PostsClient(base_url=args.base_url) as client:
        post = await client.get_post(args.post_id)
        print("=" * 65)
        print(f"Post       : {post.id} (user {post.user_id})")
        print(f"Title      : {post.title}")
        print("=" * 65)

        status, created = await client.create_post(Post(user_id=1, title="hello", body="world"))
        print(f"Created    : status={status} id={created.id}")


if __name__ == "__main__":
    asyncio.run(main())
