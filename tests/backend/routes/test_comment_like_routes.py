import pytest


@pytest.fixture
def post_id(client, login_as) -> int:
    headers = login_as('ana@x.com')
    return client.post('/posts', json={'title': 'T', 'content': 'C'}, headers=headers).json()['id']


def test_comment_and_reply_are_listed_in_order(client, login_as, post_id) -> None:
    headers = login_as('bia@x.com', name='Bia', role='student')

    parent = client.post(f'/posts/{post_id}/comments', json={'content': 'Pergunta'}, headers=headers)
    reply = client.post(
        f'/posts/{post_id}/comments',
        json={'content': 'Resposta', 'reply_to_id': parent.json()['id']},
        headers=headers,
    )

    assert parent.status_code == reply.status_code == 201
    comments = client.get(f'/posts/{post_id}/comments', headers=headers).json()
    assert [comment['content'] for comment in comments] == ['Pergunta', 'Resposta']
    assert comments[1]['reply_to_id'] == comments[0]['id']
    assert comments[0]['user_id'] == 2


def test_reply_to_comment_on_other_post_is_rejected(client, login_as, post_id) -> None:
    headers = login_as('ana@x.com')
    other_post = client.post('/posts', json={'title': 'T2', 'content': 'C2'}, headers=headers).json()['id']
    comment_id = client.post(f'/posts/{other_post}/comments', json={'content': 'x'}, headers=headers).json()['id']

    response = client.post(
        f'/posts/{post_id}/comments',
        json={'content': 'y', 'reply_to_id': comment_id},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()['step'] == 'reply_to_id'


def test_only_comment_author_can_edit_or_delete(client, login_as, post_id) -> None:
    author = login_as('ana@x.com')
    other = login_as('bia@x.com', name='Bia', role='student')
    comment_id = client.post(f'/posts/{post_id}/comments', json={'content': 'x'}, headers=author).json()['id']

    assert client.put(f'/comments/{comment_id}', json={'content': 'hack'}, headers=other).status_code == 403
    assert client.delete(f'/comments/{comment_id}', headers=other).status_code == 403

    response = client.put(f'/comments/{comment_id}', json={'content': 'edited'}, headers=author)
    assert response.json()['content'] == 'edited'
    assert client.delete(f'/comments/{comment_id}', headers=author).status_code == 200
    assert client.get(f'/posts/{post_id}/comments', headers=author).json() == []


def test_comment_on_missing_post_returns_404(client, login_as) -> None:
    response = client.post('/posts/999/comments', json={'content': 'x'}, headers=login_as('ana@x.com'))

    assert response.status_code == 404


def test_like_toggles_on_and_off(client, login_as, post_id) -> None:
    headers = login_as('bia@x.com', name='Bia', role='student')

    liked = client.post(f'/posts/{post_id}/like', headers=headers).json()
    assert liked == {'liked': True, 'count': 1}
    assert client.get(f'/posts/{post_id}/likes', headers=headers).json() == {'count': 1, 'user_ids': [2]}
    assert client.get('/users/me/likes', headers=headers).json() == {'post_ids': [post_id]}

    unliked = client.post(f'/posts/{post_id}/like', headers=headers).json()
    assert unliked == {'liked': False, 'count': 0}
    assert client.get(f'/posts/{post_id}/likes', headers=headers).json() == {'count': 0, 'user_ids': []}
