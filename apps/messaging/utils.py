from .models import Message


def group_conversations(user, messages):
    """
    Collapse ``user``'s messages into one entry per correspondent.

    ``messages`` is a queryset ordered newest first. Only the id columns are
    read while grouping: the first pass keys every message by the other
    party and keeps the first (latest) one seen, the second counts the
    caller's unread incoming messages per sender. The latest messages are
    then loaded in full with their sender and receiver.
    """
    rows = list(messages.values_list('pk', 'sender_id', 'receiver_id', 'is_read'))
    latest = {}
    unread = {}

    for pk, sender_id, receiver_id, _ in rows:
        other_id = receiver_id if sender_id == user.pk else sender_id
        latest.setdefault(other_id, pk)

    for _, sender_id, receiver_id, is_read in rows:
        if receiver_id == user.pk and not is_read:
            unread[sender_id] = unread.get(sender_id, 0) + 1

    last_messages = Message.objects.select_related('sender', 'receiver').in_bulk(latest.values())
    conversations = []
    for other_id, pk in latest.items():
        message = last_messages[pk]
        conversations.append({
            'other_user': message.receiver if message.sender_id == user.pk else message.sender,
            'last_message': message,
            'unread_count': unread.get(other_id, 0),
        })

    return sorted(
        conversations,
        key=lambda entry: (entry['last_message'].created_at, entry['last_message'].pk),
        reverse=True
    )
