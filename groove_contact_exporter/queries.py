"""GraphQL documents and request payloads for the Groove conversations API.

The documents are the ones the Groove web app sends; they are kept
byte-for-byte so the API accepts them.
"""

from .models import PAGE_SIZE, BodySearch, SearchSpec, TagSearch

ORDER_BY = {
    "field": "LATEST_COLLABORATOR_COMMENT_AT",
    "direction": "DESC",
}

GRAPHQL_QUERY_BODY = """query TicketConversationsQuery($filter: ConversationFilter, $orderBy: ConversationOrder, $cursor: String, $size: Int){
  conversations(filter: $filter, orderBy: $orderBy, after: $cursor, first: $size) {
    nodes {
      contact {
        id
        email
        firstName
        lastName
        name
      }
    }
    totalCount
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}"""

# Tag search requests the full conversation fragments
GRAPHQL_QUERY_TAG = """
query TicketConversationsQuery($filter: ConversationFilter, $orderBy: ConversationOrder, $cursor: String, $size: Int){
  conversations(filter: $filter, orderBy: $orderBy, after: $cursor, first: $size) {
    nodes {

  ...conversationFragment
  ...widgetConversationFragment

    }
    totalCount
    totalPageCount
    pageInfo {
      hasNextPage
      hasPreviousPage
      endCursor
      startCursor
    }
  }
}

fragment conversationFragment on Conversation {
  __typename
  id
  assigned {
    agent {
      id
      name
      email
    }
    team {
      id
      name
    }
    at
  }
  channel {
    id
    color
  }
  contact {
    id
    avatarUrl
    email
    firstName
    lastName
    name
    lastSeenAt
    createdAt

  }



  drafts {
    edges {
      node {
        id
        agent {
          id
        }
        draftId
        draftType
        updatedAt
        version
        payload
        conversationId
        __typename
      }
    }
  }

  deletedAt
  number
  snoozed {
    by {
      id
    }
    until
  }
  starred
  state
  stateUpdatedAt
  summaryMessage {
    bodyPlainText
    isNote
    author {
      ... on Agent {
        id
      }
      ... on Contact {
        id
      }
    }
  }
  systemUpdatedAt
  updatedAt
  createdAt
  subject
  lastUnansweredUserMessageAt
  tags {
    nodes {
      id
      name
      color
    }
  }
  mentions {
    id
    agent {
      id
    }
  }
  counts {
    messages
    interactions
    attachments
  }
}

fragment widgetConversationFragment on WidgetConversation {
  ...conversationFragment
  browser
  pageTitle
  pageUrl
  platform
  referrer
}
"""


def build_filter(spec: SearchSpec) -> dict:
    if isinstance(spec, TagSearch):
        return {"tagNames": [spec.tag_name]}
    return {"keywords": spec.text}


def build_query_id(spec: SearchSpec) -> str:
    """Saved-view identifier the web app sends alongside the filter."""
    if isinstance(spec, TagSearch):
        return f'tag:"{spec.tag_name}" type:mailbox orderBy:newestByCollaborator'
    return f'type:mailbox orderBy:newestByCollaborator search:"{spec.text}"'


def document_for(spec: SearchSpec) -> str:
    if isinstance(spec, TagSearch):
        return GRAPHQL_QUERY_TAG
    return GRAPHQL_QUERY_BODY


def build_request(spec: SearchSpec, cursor: str | None = None, size: int = PAGE_SIZE) -> dict:
    """Build the POST body for one page of conversations.

    `cursor` is the previous page's endCursor (None for the first page) and
    is passed through untouched.
    """
    if not isinstance(spec, (BodySearch, TagSearch)):
        raise TypeError(f"Unsupported search spec: {spec!r}")
    return {
        "query": document_for(spec),
        "_method": "POST",
        "variables": {
            "filter": build_filter(spec),
            "queryId": build_query_id(spec),
            "orderBy": dict(ORDER_BY),
            "cursor": cursor,
            "size": size,
        },
    }
