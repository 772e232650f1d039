"""Document store access: one DynamoDB table per collection."""
