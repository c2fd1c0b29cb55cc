"""kie-studio: submit and poll Kie.ai video generation tasks."""
