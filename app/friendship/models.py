friend_request_status_sql = """
CREATE TYPE friend_request_status AS ENUM ('pending', 'accepted', 'rejected');
"""

friend_requests_sql = """
CREATE TABLE friend_requests (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),

    from_user_id UUID NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
    to_user_id   UUID NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,

    status friend_request_status NOT NULL DEFAULT 'pending',

    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),

    -- No self-requests. The service checks this too.
    CONSTRAINT prevent_self_request CHECK (from_user_id <> to_user_id)
);

-- Rejected edges are history; a new request is a new row, so no UNIQUE pair.
CREATE INDEX friend_requests_from_idx ON friend_requests (from_user_id, status);
CREATE INDEX friend_requests_to_idx ON friend_requests (to_user_id, status);
"""
