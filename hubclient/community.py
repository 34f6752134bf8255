"""Community members, profiles and the optimistic follow toggle."""

import copy
import logging

from hubclient.mutations import Mutation
from hubclient.query_cache import QueryCache

logger = logging.getLogger(__name__)

MEMBER_FILTERS = {
    "verified": {"verified": "true"},
    "top": {"sortBy": "cocktails"},
    "new": {"sortBy": "newest"},
}


def profile_key(user_id):
    return ("user", "profile", str(user_id))


def followers_key(user_id):
    return ("user", "followers", str(user_id))


def members_key(filter_name=None, limit=None):
    return ("community", "members", filter_name or "all", limit)


def _user_id(entry):
    return str(entry.get("id"))


class CommunityClient:
    """Cached reads plus a follow toggle that updates the cache before the server answers."""

    def __init__(self, api, current_user_id, cache=None):
        self.api = api
        self.current_user_id = str(current_user_id)
        self.cache = cache or QueryCache()
        self.follow_mutation = Mutation(
            self._request_toggle,
            on_mutate=self._on_mutate,
            on_error=self._on_error,
            on_settled=self._on_settled,
        )

    # reads

    def members(self, filter_name=None, limit=None):
        params = dict(MEMBER_FILTERS.get(filter_name, {}))
        if limit:
            params["limit"] = limit

        def fetch():
            body = self.api.list_users(**params)
            return {"users": body["data"], "total": body.get("total", len(body["data"]))}

        return self.cache.fetch_query(members_key(filter_name, limit), fetch)

    def profile(self, user_id):
        return self.cache.fetch_query(profile_key(user_id), lambda: self.api.get_user(user_id))

    def followers(self, user_id):
        def fetch():
            body = self.api.get_followers(user_id)
            return {"followers": body["data"], "count": body.get("total", len(body["data"]))}

        return self.cache.fetch_query(followers_key(user_id), fetch)

    # follow toggle

    def toggle_follow(self, user_id):
        """
        Follow or unfollow `user_id`; the server decides the final state.

        Raises the ApiClientError after rolling the cache back.
        """
        return self.follow_mutation.mutate({"user_id": str(user_id)})

    @property
    def is_pending(self):
        return self.follow_mutation.is_pending

    def _request_toggle(self, variables):
        return self.api.toggle_follow(variables["user_id"])

    def _on_mutate(self, variables):
        user_id = variables["user_id"]
        self.cache.cancel_queries(followers_key(user_id))
        self.cache.cancel_queries(profile_key(user_id))

        prev_followers = copy.deepcopy(self.cache.get_query_data(followers_key(user_id)))
        prev_profile = copy.deepcopy(self.cache.get_query_data(profile_key(user_id)))

        if prev_followers is not None:
            currently_following = any(_user_id(f) == self.current_user_id for f in prev_followers["followers"])
        else:
            currently_following = bool(prev_profile and prev_profile.get("isFollowing"))
        delta = -1 if currently_following else 1

        if prev_followers is not None:
            followers = [f for f in prev_followers["followers"] if _user_id(f) != self.current_user_id]
            if not currently_following:
                followers.append({"id": self.current_user_id, "name": "You"})
            count = prev_followers.get("count", len(prev_followers["followers"]))
            self.cache.set_query_data(
                followers_key(user_id),
                dict(prev_followers, followers=followers, count=max(0, count + delta)),
            )

        if prev_profile is not None:
            self.cache.set_query_data(
                profile_key(user_id),
                dict(
                    prev_profile,
                    followersCount=max(0, (prev_profile.get("followersCount") or 0) + delta),
                    isFollowing=not currently_following,
                ),
            )

        return {"prev_followers": prev_followers, "prev_profile": prev_profile}

    def _on_error(self, error, variables, context):
        if not context:
            return
        user_id = variables["user_id"]
        if context["prev_followers"] is not None:
            self.cache.set_query_data(followers_key(user_id), context["prev_followers"])
        if context["prev_profile"] is not None:
            self.cache.set_query_data(profile_key(user_id), context["prev_profile"])
        logger.warning("Failed to update follow status for %s: %s", user_id, error)

    def _on_settled(self, result, error, variables, context):
        user_id = variables["user_id"]
        self.cache.invalidate_queries(profile_key(user_id))
        self.cache.invalidate_queries(followers_key(user_id))
        self.cache.invalidate_queries(("community", "members"))
