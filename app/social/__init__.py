"""
Social app: the follow graph between users.

Following is one-directional (like subscribing). Each follow updates two
denormalized counters on Profile: the target's subscribers_count and the
follower's subscriptions_count.
"""
