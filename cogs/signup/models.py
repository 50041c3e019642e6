from tortoise import fields, models


class ListMembership(models.Model):
    """
    One row per configured list, keyed by the list's display name.
    Members hang off it in ListMember so that "add if absent" is a single
    insert guarded by a unique constraint.
    """
    list_name = fields.CharField(max_length=100, pk=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    members: fields.ReverseRelation["ListMember"]

    class Meta:
        table = "list_memberships"


class ListMember(models.Model):
    """A user enrolled in a list. Display order follows the auto-increment id."""
    id = fields.IntField(pk=True)
    membership = fields.ForeignKeyField(
        'models.ListMembership', related_name='members', to_field='list_name', on_delete=fields.CASCADE
    )
    user_id = fields.BigIntField()
    joined_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "list_members"
        unique_together = (("membership", "user_id"),)


class Cooldown(models.Model):
    """
    Re-join restriction for (user, list), created by confirm.
    At most one row per pair; confirm overwrites expires_at in place.
    """
    id = fields.IntField(pk=True)
    user_id = fields.BigIntField()
    list_name = fields.CharField(max_length=100)
    expires_at = fields.DatetimeField(index=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "list_cooldowns"
        unique_together = (("user_id", "list_name"),)
